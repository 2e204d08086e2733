"""
aws_ip/cli - 명령줄 인터페이스

Usage:
    from aws_ip.cli import cli
"""

from .app import cli, main

__all__ = ["cli", "main"]
