"""Slack Integration Package.

This package contains the Slack integration modules. Contains:

- blocks: Block Kit construction helpers and validation.
- webhook: Incoming webhook client used to post notification messages.
"""
