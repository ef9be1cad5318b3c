"""ctxfix - migrate Go packages from golang.org/x/net/context to stdlib context."""

__version__ = "0.1.0"
