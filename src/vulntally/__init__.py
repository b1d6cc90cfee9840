"""vulntally — summarise Amazon Inspector findings for tagged container images."""

__version__ = "0.1.0"
