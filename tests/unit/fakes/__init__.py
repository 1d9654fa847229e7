"""Test substitutes for ec2-ssh-proxy collaborators."""

from fakes.fake_plugin import RecordingPlugin

PUBLIC_KEY = (
    "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIIh/cv/ZQJrE0UkZFEF8WyT9Hs7DNnrK9epzzP0BAZEB "
    "user@example\n"
)

__all__ = ["PUBLIC_KEY", "RecordingPlugin"]
