"""
logship - ship build logs, with build metadata, to a log-ingestion endpoint.

Packages:
    core        Error hierarchy, collaborator protocols, settings
    delivery    LogsWriter: the log delivery pipeline
    metadata    BuildMetadata and the providers that resolve it
    transports  HTTP and console transports
    execution   File-backed builds
    framework   Structured logging
    cli         ``logship`` command
"""

__version__ = "0.3.0"
