"""Month calendar showing Gregorian and Jalali dates side by side."""

__version__ = "0.3.0"
