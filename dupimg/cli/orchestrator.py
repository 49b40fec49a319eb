"""
CLI workflow orchestration for dupimg.

Provides the CLIOrchestrator class that coordinates the entire CLI workflow
from argument parsing through the per-pair resolution walk.
"""

from __future__ import annotations

import logging

from ..cache import FingerprintCache
from ..exceptions import DecodeError, InsufficientImagesError, InvalidPathError
from ..models import Decision, ResolvedPair
from ..resolver import walk_matches
from ..scanner import find_similar_images, scale_image
from ..utils.exporters import export_results
from ..utils.validators import validate_scan_params
from .arg_parser import parse_arguments
from .interactive import (
    prompt_for_directory,
    prompt_for_single_image,
    prompt_for_decision,
    confirm_action,
)
from .reporting import print_pair, print_scan_summary, print_walk_summary


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Manages the complete lifecycle from argument parsing through scanning,
    reporting and handing each duplicate pair to the chosen collaborator.
    """

    def __init__(self, argv=None):
        """
        Initialize the orchestrator.

        Args:
            argv: Command-line arguments (default: sys.argv)
        """
        self.argv = argv
        self.logger = None
        self.args = None
        self.cache = None
        self.scan = None
        self.pairs: list[ResolvedPair] = []
        self.stats = None

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)

        Workflow phases:
        1. Setup & argument parsing
        2. Interactive prompts (if needed)
        3. Validation
        4. Configuration
        5. Scanning & comparison
        6. Resolution walk
        7. Export & summary
        """
        self._setup_phase()
        self._interactive_phase()

        exit_code = self._validate_phase()
        if exit_code != 0:
            return exit_code

        self._configure_phase()

        exit_code = self._scan_phase()
        if exit_code != 0 or self.scan is None:
            return exit_code

        print_scan_summary(self.scan)

        if not self._confirm_phase():
            self.logger.info("Aborted.")
            return 0

        self._resolve_phase()
        self._export_phase()
        print_walk_summary(self.stats, dry_run=self.args.dry_run)
        return 0

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _interactive_phase(self) -> None:
        """Phase 2: Ask for the directory and single image if none was given."""
        if self.args.directory is None:
            self.args.directory = prompt_for_directory()
            if self.args.single_image is None:
                self.args.single_image = prompt_for_single_image()

    def _validate_phase(self) -> int:
        """
        Phase 3: Validate arguments.

        Returns:
            0 for success, 1 for validation error
        """
        is_valid, error = validate_scan_params(
            str(self.args.directory),
            single_image=str(self.args.single_image) if self.args.single_image else None,
            threshold=self.args.threshold,
            workers=self.args.workers,
        )
        if not is_valid:
            self.logger.error(error)
            return 1
        return 0

    def _configure_phase(self) -> None:
        """Phase 4: Configure runtime options."""
        self.cache = FingerprintCache(scale_image, enabled=not self.args.no_cache)
        if self.args.no_cache:
            self.logger.info("Cache disabled - scaling all images fresh")
        if self.args.skip_errors:
            self.logger.info("Images that cannot be decoded will be skipped")
        self.show_progress = not self.args.no_progress

    def _log_progress(self, done: int, total: int) -> None:
        """Progress observer for the comparison sweep."""
        self.logger.info(f"Comparing: {done / total * 100:.2f}% ({done:,} / {total:,})")

    def _scan_phase(self) -> int:
        """
        Phase 5: Fingerprint the directory and compare images.

        Returns:
            0 for success or nothing to compare, 1 for error
        """
        try:
            self.scan = find_similar_images(
                self.args.directory,
                single_image=self.args.single_image,
                threshold=self.args.threshold,
                cache=self.cache,
                max_workers=self.args.workers,
                skip_errors=self.args.skip_errors,
                progress_callback=self._log_progress,
                progress_interval=self.args.progress_interval,
                show_progress=self.show_progress,
                logger=self.logger,
            )
        except InvalidPathError as e:
            self.logger.error(str(e))
            return 1
        except DecodeError as e:
            self.logger.error(str(e))
            self.logger.info("Tip: use --skip-errors to ignore files that cannot be decoded")
            return 1
        except InsufficientImagesError as e:
            self.logger.info(str(e))
            return 0

        if self.cache.stats.write_errors:
            self.logger.warning(
                f"{self.cache.stats.write_errors:,} fingerprints could not be cached"
            )
        self.logger.info(f"Found {self.scan.match_count:,} similar pairs")
        return 0

    def _confirm_phase(self) -> bool:
        """Ask before deleting every duplicate unless told not to."""
        if self.args.action != 'delete' or self.args.yes or self.args.dry_run:
            return True
        if not self.scan.matches:
            return True
        return confirm_action('delete', self.scan.match_count)

    def _decide(self, pair: ResolvedPair) -> Decision:
        """Collaborator for the resolution walk, chosen by --action."""
        self.pairs.append(pair)
        print_pair(pair)

        if self.args.action == 'prompt':
            return prompt_for_decision(pair)
        if self.args.action == 'delete':
            return Decision.DELETE_DUPLICATE
        return Decision.KEEP_BOTH

    def _resolve_phase(self) -> None:
        """Phase 6: Hand each duplicate pair to the collaborator."""
        if self.args.dry_run:
            self.logger.info("[DRY RUN MODE - No files will be deleted]")

        self.stats = walk_matches(
            self.scan.matches,
            self.scan.images,
            self._decide,
            dry_run=self.args.dry_run,
            logger=self.logger,
        )

    def _export_phase(self) -> None:
        """Phase 7: Export the presented pairs if requested."""
        if not self.args.export:
            return
        try:
            export_results(self.pairs, self.args.export, self.args.export_format)
            self.logger.info(f"Results exported to: {self.args.export}")
        except OSError as e:
            self.logger.error(f"Export failed: {e}")


__all__ = ['CLIOrchestrator', 'setup_logging']
