"""planview - scheduling and timeline engine for Jira-style projects."""

__version__ = "0.1.0"
