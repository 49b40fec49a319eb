"""
CLI package for dupimg.

Provides the command-line interface for scanning a directory for visually
duplicate images and deciding, pair by pair, which copy to keep.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- print_pair: Function to display a duplicate pair
- prompt_for_decision: Console collaborator for the resolution walk
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .reporting import print_pair, print_scan_summary, print_walk_summary
from .interactive import (
    prompt_for_directory,
    prompt_for_single_image,
    prompt_for_decision,
    confirm_action,
)


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Delegates to CLIOrchestrator to execute the complete workflow.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    orchestrator = CLIOrchestrator(argv)
    return orchestrator.run()


__all__ = [
    # Main entry point
    'main',
    # Core classes
    'CLIOrchestrator',
    # Utilities
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_pair',
    'print_scan_summary',
    'print_walk_summary',
    'prompt_for_directory',
    'prompt_for_single_image',
    'prompt_for_decision',
    'confirm_action',
]
