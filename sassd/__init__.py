"""sassd: HTTP daemon and middleware compiling Sass stylesheets on request."""

__version__ = "0.1.0"
