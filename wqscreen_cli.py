#!/usr/bin/env python3
import os
import sys
import logging
import argparse
from datetime import datetime

from wqscreen import __version__
from wqscreen.services.logging_config import setup_main_logging
from wqscreen.services.config_loader import DEFAULT_CONFIG_FILE
from wqscreen import workflows

logger = logging.getLogger(__name__)

def _setup_arguments():
    """Configures command-line arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="wqscreen: surface water hardness-dependent metal screening and PFAS charts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Screen metals against hardness-dependent criteria (Warning level)
  ./wqscreen_cli.py --hardness

  # Run with INFO level logging
  ./wqscreen_cli.py --hardness -v

  # Reject criteria rows whose class label is not acute/chronic
  ./wqscreen_cli.py --hardness --strict-criteria

  # Render the PFAS stacked bar chart with a reproducible random palette
  ./wqscreen_cli.py --pfas --seed 42

  # Run both jobs with DEBUG logging
  ./wqscreen_cli.py --hardness --pfas -vv

  # Write the screen somewhere else
  ./wqscreen_cli.py --hardness --output Output/screen_2025.xlsx

  # Check configuration and input files, then exit
  ./wqscreen_cli.py --check-config
"""
    )

    parser.add_argument(
        "--hardness",
        action="store_true",
        help="Run the hardness-dependent metal screen."
    )
    parser.add_argument(
        "--pfas",
        action="store_true",
        help="Render the PFAS stacked bar chart."
    )
    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        default=DEFAULT_CONFIG_FILE,
        help="Config file name in config/ or an absolute path (default: config.ini)"
    )
    parser.add_argument(
        "-b", "--base-dir",
        metavar="DIR",
        default=".",
        help="Directory that relative Data/ and Output/ paths resolve against (default: .)"
    )
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        default=None,
        help="Override the output path (only with a single job)."
    )
    parser.add_argument(
        "--strict-criteria",
        action="store_true",
        help="Fail if the criteria table has class labels other than acute/chronic aquatic life."
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the 'random' PFAS palette."
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Check configuration and input files, and exit."
    )
    parser.add_argument(
        "--log-dir",
        metavar="DIR",
        default="logs",
        help="Directory for log files (default: logs)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (default: WARNING, -v: INFO, -vv: DEBUG)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show the program's version number and exit"
    )

    return parser

def main(argv=None) -> int:
    parser = _setup_arguments()
    args = parser.parse_args(argv)

    if not args.hardness and not args.pfas and not args.check_config:
        parser.print_help()
        return 0

    # 1. Setup Logging
    if args.check_config:
        log_name = f"config_{datetime.now().strftime('%Y%m%d')}"
        log_level, _ = setup_main_logging(args.verbose + 1, log_name, log_dir=args.log_dir)
    else:
        log_name = f"wqscreen_{datetime.now().strftime('%Y%m%d_%H%M')}"
        log_level, _ = setup_main_logging(args.verbose, log_name, log_dir=args.log_dir)

    logger.info(f"--- {os.path.basename(sys.argv[0])} Starting ---")
    logger.info(f"Arguments: {vars(args)}")
    logger.info(f"Log level set to: {logging.getLevelName(log_level)}")

    if args.check_config:
        logger.info("Running configuration and input file check...")
        from wqscreen.services.health_check import check_configurations
        if check_configurations(args.config, args.base_dir):
            logger.info("--- ✅ All checks passed ---")
            return 0
        logger.error("--- ❌ One or more checks FAILED ---")
        return 1

    # 2. Dispatch to the workflow
    try:
        outputs = workflows.run_processing_workflow(
            hardness=args.hardness,
            pfas=args.pfas,
            config_file=args.config,
            base_dir=args.base_dir,
            strict_criteria=args.strict_criteria,
            seed=args.seed,
            output_path=args.output,
        )
    except Exception as e:
        logger.critical(f"A fatal error occurred in the workflow: {e}", exc_info=True)
        return 1

    for job, path in outputs.items():
        print(f"{job}: results saved to {path}")

    logger.info(f"--- {os.path.basename(sys.argv[0])} Finished ---")
    return 0

# --- Main Execution ---
if __name__ == "__main__":
    sys.exit(main())
