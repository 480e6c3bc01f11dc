"""bidismoke - WebDriver BiDi element-screenshot smoke test for Chrome."""

__version__ = "0.1.0"
