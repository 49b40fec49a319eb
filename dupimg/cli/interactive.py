"""
Interactive prompts for the CLI interface.

Provides functions for user interaction including directory selection,
per-pair decisions and action confirmation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..models import Decision, ResolvedPair

# Keys accepted at the per-pair prompt
DECISION_KEYS = {
    'k': Decision.KEEP_BOTH,
    'o': Decision.DELETE_ORIGINAL,
    'd': Decision.DELETE_DUPLICATE,
    'q': Decision.ABORT_REMAINING,
}


def prompt_for_directory() -> Path:
    """
    Interactively prompt user for a directory to scan.

    Returns:
        Path object for the directory (validated later by the orchestrator)

    Notes:
        - Displays banner with application name
        - Handles quoted paths (strips quotes)
    """
    print("\n" + "=" * 50)
    print("  DUPLICATE IMAGE FINDER")
    print("=" * 50)

    dir_input = input("\nEnter path to image source directory: ").strip()
    return Path(dir_input.strip('"\''))


def prompt_for_single_image() -> Optional[Path]:
    """
    Ask for the optional single image to compare against the directory.

    Returns:
        Path of the image, or None to compare images within the directory
    """
    image_input = input(
        "Enter path to single image file "
        "(leave empty to compare images within the directory): "
    ).strip().strip('"\'')
    if not image_input:
        return None
    return Path(image_input)


def prompt_for_decision(pair: ResolvedPair) -> Decision:
    """
    Ask the user what to do with a duplicate pair.

    Args:
        pair: The pair that was just printed

    Returns:
        The chosen Decision; end of input aborts the remaining pairs

    Examples:
        >>> prompt_for_decision(pair)
        [k]eep both, delete [o]riginal, delete [d]uplicate, [q]uit: d
        <Decision.DELETE_DUPLICATE: 'delete_duplicate'>
    """
    while True:
        try:
            answer = input(
                "[k]eep both, delete [o]riginal, delete [d]uplicate, [q]uit: "
            ).strip().lower()
        except EOFError:
            return Decision.ABORT_REMAINING

        decision = DECISION_KEYS.get(answer[:1])
        if decision is not None:
            return decision
        print("Please answer k, o, d or q.")


def confirm_action(action: str, count: int) -> bool:
    """
    Prompt user to confirm a file action.

    Args:
        action: The action to be performed (e.g., 'delete')
        count: Number of files that may be affected

    Returns:
        True if user confirms (types 'y'), False otherwise

    Examples:
        >>> confirm_action('delete', 42)
        This will delete up to 42 files. Continue? [y/N]: y
        True
    """
    confirm = input(f"\nThis will {action} up to {count:,} files. Continue? [y/N]: ")
    return confirm.strip().lower() == 'y'


__all__ = [
    'DECISION_KEYS',
    'prompt_for_directory',
    'prompt_for_single_image',
    'prompt_for_decision',
    'confirm_action',
]
