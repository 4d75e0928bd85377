"""HTTP API for the attendance rewards engine."""

from attendance_rewards.api.app import create_app

__all__ = ["create_app"]
