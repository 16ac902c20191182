"""clawslack - Slack outbound messaging"""

__version__ = "0.1.0"
