"""Slack Block Kit utilities and validation.

This module provides utilities for working with Slack Block Kit elements,
including validation and construction helpers. Blocks are built with the
``slack_sdk.models.blocks`` classes and returned as plain dictionaries
ready to be posted.
"""

from typing import Dict, List

from slack_sdk.models.blocks import DividerBlock, MarkdownTextObject, SectionBlock

from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Slack rejects section text longer than this
SECTION_TEXT_LIMIT = 3000
SECTION_FIELDS_LIMIT = 10


def validate_blocks(blocks: List[Dict]) -> bool:
    """
    Validate that the provided blocks are valid Slack Block Kit structures.

    This performs basic structural validation to catch common errors before
    sending blocks to Slack. It's not exhaustive but covers the block types
    used by notification messages.

    Args:
        blocks: List of Slack block dictionaries to validate

    Returns:
        bool: True if blocks are structurally valid, False otherwise

    Examples:
        >>> blocks = [
        ...     {"type": "section", "text": {"type": "mrkdwn", "text": "Hello"}},
        ...     {"type": "divider"}
        ... ]
        >>> validate_blocks(blocks)
        True

        >>> invalid_blocks = [{"text": "missing type"}]
        >>> validate_blocks(invalid_blocks)
        False
    """
    if not isinstance(blocks, list):
        return False

    for block in blocks:
        if not isinstance(block, dict):
            return False

        if "type" not in block:
            return False

        block_type = block.get("type")

        # Sections carry either text or fields
        if block_type == "section" and "text" not in block and "fields" not in block:
            return False

        if block_type == "section" and len(block.get("fields", [])) > SECTION_FIELDS_LIMIT:
            return False

        # Divider blocks should be minimal
        if block_type == "divider" and len(block) > 1:
            return False

    return True


def truncate_text(text: str, limit: int = SECTION_TEXT_LIMIT) -> str:
    """Shorten ``text`` to ``limit`` characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    logger.warning("slack_text_truncated", length=len(text), limit=limit)
    return text[: limit - 3] + "..."


def create_section_block(text: str) -> Dict:
    """
    Create a mrkdwn section block with the given text.

    Args:
        text: The text content for the section

    Returns:
        Dict: A valid Slack section block
    """
    return SectionBlock(text=MarkdownTextObject(text=truncate_text(text))).to_dict()


def create_fields_block(fields: List[str]) -> Dict:
    """
    Create a section block laid out as two columns of mrkdwn fields.

    Fields fill the columns left to right, so a list of four renders as two
    rows.

    Args:
        fields: Field texts, at most ten

    Returns:
        Dict: A valid Slack section block with fields
    """
    return SectionBlock(
        fields=[MarkdownTextObject(text=field) for field in fields]
    ).to_dict()


def create_divider_block() -> Dict:
    """
    Create a divider block.

    Returns:
        Dict: A valid Slack divider block
    """
    return DividerBlock().to_dict()
