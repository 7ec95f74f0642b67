"""GymFix: gym-equipment service and spare-parts inventory."""

__version__ = "1.0.0"
