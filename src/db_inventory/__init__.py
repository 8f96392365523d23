# ABOUTME: Site database inventory built from a remote manifest and local config files
# ABOUTME: Exposes the version; see main.py for the CLI and core/service.py for the pipeline

__version__ = "0.1.0"
