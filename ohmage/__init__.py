"""ohmage - mobile health data collection service."""
