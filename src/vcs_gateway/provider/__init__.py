"""Provider contract, shared base, factory and fake implementation."""
