"""protoc plugin that generates Twirp-to-use-case adapters in Go."""

__version__ = "0.1.0"
