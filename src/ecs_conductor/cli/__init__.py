"""Command line interface for ECS Conductor."""
