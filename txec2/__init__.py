from txec2._version import __version__

__all__ = ["__version__"]

# The EC2 API version signed into every request unless overridden.
ec2_api = "2012-07-20"
