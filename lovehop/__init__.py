"""Love Journey: a lane-crossing hopper with a cosy epilogue."""

__version__ = "1.0.0"
