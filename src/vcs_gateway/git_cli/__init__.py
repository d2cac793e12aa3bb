"""Provider implementation backed by the ``git`` command line."""
