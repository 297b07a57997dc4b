"""Natural-language shell pipeline, shell runner, YAML workflows and terminal UI state helpers."""

__version__ = "0.1.0"