"""DCM CLI entry point."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from dcm import __version__
from dcm.config import Settings, get_settings
from dcm.engine import PayoutReport, compute_report
from dcm.exceptions import ParticipantError, PayoutError
from dcm.observability import configure_logging, initialize_logfire
from dcm.roster import dump_results, load_roster, results_to_rows, write_sample_roster

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# DCM Configuration
# Engine parameters and display options. Secrets belong in .env, not here.

engine:
  leverage_bound: 5.0          # multiplier granted at 100% confidence
  default_winning_side: "YES"  # used when neither --winner nor the roster names one

display:
  decimals: 2
"""


def _init_observability(settings: Settings, args: argparse.Namespace) -> None:
    """Apply the configured log level and start Logfire if a token is set."""
    if not args.debug:
        logging.getLogger().setLevel(settings.log_level)
    if settings.logfire_token:
        initialize_logfire(settings)


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize data directory with config and sample roster."""
    data_dir = Path(args.data_dir).resolve()

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created data directory: {data_dir}")

        config_path = data_dir / "config.yaml"
        if not config_path.exists():
            config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
            logger.info(f"Created config template: {config_path}")
        else:
            logger.info(f"Config file already exists: {config_path}")

        roster_path = data_dir / "roster.yaml"
        if not roster_path.exists():
            write_sample_roster(roster_path)
            logger.info(f"Created sample roster: {roster_path}")
        else:
            logger.info(f"Roster file already exists: {roster_path}")

        print(f"\n✓ Data directory initialized at {data_dir}")
        print("\nNext steps:")
        print("1. Edit data/roster.yaml with your participants")
        print("2. Run 'python -m dcm calculate' to compute payouts\n")

        return 0

    except OSError as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"\n❌ Initialization failed: {e}\n")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== DCM Configuration ===\n")
        print(f"Data Directory: {settings.data_dir}\n")

        print("Engine:")
        print(f"  Leverage Bound: {settings.engine.leverage_bound:g}x")
        print(f"  Default Winning Side: {settings.engine.default_winning_side}\n")

        print("Display:")
        print(f"  Decimals: {settings.display.decimals}\n")

        print("Observability:")
        print(f"  Log Level: {settings.log_level}")
        print(f"  Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")

        return 0

    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1


def _print_table(report: PayoutReport, decimals: int) -> None:
    headers = ["Name", "Side", "Multiplier", "Weight", "Payout", "Profit"]
    rows = [
        [
            row["name"],
            row["side"],
            f"{row['multiplier']:.{decimals}f}",
            f"{row['weight']:.{decimals}f}",
            f"{row['payout']:.{decimals}f}",
            f"{row['profit']:+.{decimals}f}",
        ]
        for row in results_to_rows(report)
    ]
    widths = [max(len(str(c)) for c in col) for col in zip(headers, *rows)]

    def fmt(cells: list[str]) -> str:
        return "  ".join(str(c).rjust(w) if i >= 2 else str(c).ljust(w)
                         for i, (c, w) in enumerate(zip(cells, widths)))

    print(f"\n=== Payouts ({report.winning_side} wins, {report.leverage_bound:g}x leverage) ===\n")
    print(fmt(headers))
    print("  ".join("-" * w for w in widths))
    for row in rows:
        print(fmt(row))

    pools = report.pools
    print()
    print(f"Losing Pool: ${pools.losing_pool:,.{decimals}f}")
    print(f"Winner Total Weight: {pools.winner_total_weight:,.{decimals}f}")
    print(f"Total Payout: ${report.total_payout:,.{decimals}f}")
    if report.unclaimed_pool > 0:
        print(f"Unclaimed: ${report.unclaimed_pool:,.{decimals}f} (winning side has no weight)")
    print()


def cmd_calculate(args: argparse.Namespace) -> int:
    """Compute payouts for a roster file."""
    try:
        settings = get_settings()
        _init_observability(settings, args)

        roster_path = Path(args.roster) if args.roster else settings.data_dir / "roster.yaml"
        roster = load_roster(roster_path)

        winning_side = args.winner or roster.winning_side or settings.engine.default_winning_side
        leverage_bound = (
            args.leverage if args.leverage is not None else settings.engine.leverage_bound
        )

        report = compute_report(roster.participants, winning_side, leverage_bound)

        if args.format == "table":
            _print_table(report, settings.display.decimals)
        else:
            print(dump_results(report, args.format))

        return 0

    except ParticipantError as e:
        logger.error(f"Invalid participant: {e}")
        print(f"\n❌ Participant #{e.index} ({e.name!r}), field '{e.field}': {e}\n")
        return 1
    except PayoutError as e:
        logger.error(f"Payout computation rejected: {e}")
        print(f"\n❌ {e}\n")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"\n❌ Configuration error: {e}\n")
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the HTTP API server."""
    import uvicorn

    settings = get_settings()
    _init_observability(settings, args)

    print(f"\n=== DCM Payout API v{__version__} ===\n")
    uvicorn.run("dcm.api.server:app", host=args.host, port=args.port, log_level="info")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="DCM: confidence-weighted payout calculator for binary staking pools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"DCM {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_init = subparsers.add_parser(
        "init",
        help="Initialize data directory with config and sample roster",
    )
    parser_init.add_argument(
        "--data-dir",
        default="data",
        help="Directory to initialize (default: ./data)",
    )
    parser_init.set_defaults(func=cmd_init)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_calculate = subparsers.add_parser(
        "calculate",
        help="Compute payouts for a roster file",
    )
    parser_calculate.add_argument(
        "--roster",
        help="Roster file (.yaml/.yml/.json); defaults to <data_dir>/roster.yaml",
    )
    parser_calculate.add_argument(
        "--winner",
        type=str.upper,
        choices=["YES", "NO"],
        help="Winning side; overrides the roster's winning_side",
    )
    parser_calculate.add_argument(
        "--leverage",
        type=float,
        help="Leverage bound (multiplier at 100%% confidence)",
    )
    parser_calculate.add_argument(
        "--format",
        choices=["table", "json", "yaml"],
        default="table",
        help="Output format",
    )
    parser_calculate.set_defaults(func=cmd_calculate)

    parser_serve = subparsers.add_parser(
        "serve",
        help="Start the HTTP API server",
    )
    parser_serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser_serve.add_argument("--port", type=int, default=8000, help="Bind port")
    parser_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    configure_logging("DEBUG" if args.debug else "WARNING")

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
