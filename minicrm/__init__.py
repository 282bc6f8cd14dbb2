"""minicrm: rule-based customer segmentation and campaign delivery tracking."""

__version__ = "0.1.0"
