"""Convert video frames into HLTAS camera-angle scripts."""

__version__ = "0.1.0"
