"""Core run logic for dotseed."""
