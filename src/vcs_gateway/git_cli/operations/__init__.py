"""Per-family orchestration of git invocations.

Each ``execute_*`` function takes ``(options, context, runner)``, builds one
or more commands, runs them and parses the output. Raw failures
(ProcessFailedError and friends) propagate; GitCliProvider maps them.
"""
