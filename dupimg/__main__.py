"""
Allow running the package with: python -m dupimg

By default, runs the CLI. The 'config' subcommand shows or creates the user
configuration file.

Examples:
    python -m dupimg                          # CLI (interactive prompts)
    python -m dupimg /path/to/photos          # Compare images within a directory
    python -m dupimg cli /path/to/photos      # Same, explicit
    python -m dupimg config --init            # Create example config file
"""

import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        # Remove 'config' from argv
        sys.argv.pop(1)
        from .user_config import get_user_config

        config = get_user_config()

        if '--init' in sys.argv or '-i' in sys.argv:
            if config.create_example_config():
                print("Created example configuration file at:")
                print(f"  {config.config_file_path}")
                print("\nEdit this file to customize dupimg settings.")
            else:
                print("Failed to create configuration file.")
                sys.exit(1)
        else:
            print(f"Configuration file: {config.config_file_path}")
            if config.config_file_path.exists():
                print("Status: found")
            else:
                print("Status: not found (using defaults)")
                print("\nRun 'python -m dupimg config --init' to create one.")

            print("\nCurrent settings:")
            print(f"  default_threshold: {config.default_threshold}")
            print(f"  default_workers: {config.default_workers}")
            print(f"  progress_interval: {config.progress_interval:,}")
            print(f"  skip_decode_errors: {config.skip_decode_errors}")
            print(f"  use_cache: {config.use_cache}")
        return

    if len(sys.argv) > 1 and sys.argv[1] == 'cli':
        # Remove 'cli' from argv so argparse doesn't see it
        sys.argv.pop(1)

    from .cli import main as cli_main
    sys.exit(cli_main())


if __name__ == '__main__':
    main()
