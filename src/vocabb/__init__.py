from vocabb.consts import VERSION

__version__ = VERSION
