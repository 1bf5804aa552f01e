"""
CLI command entry points for abs_investigator.

These functions are registered as console scripts in pyproject.toml.
"""

import argparse
import json
import logging
import random
import sys
import threading
from concurrent.futures import ThreadPoolExecutor

from abs_investigator.cache import AppCache
from abs_investigator.cli.args import add_execute_argument, add_profile_arguments
from abs_investigator.cli.logging import (
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)
from abs_investigator.config import get_settings
from abs_investigator.consensus.investigator import MultiSourceInvestigator
from abs_investigator.domain.models import DebtProfile, InvestigationReport
from abs_investigator.domain.validation import InvalidProfileError, validate_profile
from abs_investigator.matching.candidates import TrustCandidateGenerator
from abs_investigator.queries.builder import build_queries


def run_investigate():
    """Entry point for abs-investigate command."""
    parser = argparse.ArgumentParser(
        description="Find securitization trusts that may hold a consumer debt"
    )
    add_profile_arguments(parser)
    parser.add_argument("--quick", action="store_true", help="Fewer queries, no economic context")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON on stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    add_execute_argument(parser)
    args = parser.parse_args()

    logger = setup_logging("investigate", execute=args.execute, verbose=args.verbose)
    settings = get_settings()

    try:
        profile = validate_profile(
            DebtProfile(
                debt_type=args.debt_type,
                servicer_name=args.servicer,
                original_creditor=args.creditor,
                account_number=args.account_number,
                state=args.state,
                approximate_balance=args.balance,
                origination_date=args.origination_date,
            )
        )
    except InvalidProfileError as e:
        logger.error(f"Invalid debt profile: {e}")
        sys.exit(2)

    if not args.execute:
        print_dry_run_header("ABS Investigation", logger)
        _show_dry_run(profile, settings.offline_jitter, settings.random_seed, logger)
        return

    print_execute_header("ABS Investigation", logger)
    cache = AppCache(settings.cache_dir)
    try:
        investigator = MultiSourceInvestigator.from_settings(
            settings, cache=cache, show_progress=not args.json
        )
        report = _investigate_interruptibly(investigator, profile, args.quick, logger)
    finally:
        cache.close()

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        _log_report(report, logger)


def _investigate_interruptibly(
    investigator: MultiSourceInvestigator,
    profile: DebtProfile,
    quick: bool,
    logger: logging.Logger,
) -> InvestigationReport:
    """Run an investigation; Ctrl-C cancels it and keeps the partial report."""
    cancel_event = threading.Event()
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(investigator.investigate, profile, quick, cancel_event)
        try:
            return future.result()
        except KeyboardInterrupt:
            logger.warning("Interrupted; collecting partial results...")
            cancel_event.set()
            return future.result()


def _show_dry_run(
    profile: DebtProfile, jitter: bool, seed: int | None, logger: logging.Logger
) -> None:
    queries = build_queries(profile)
    logger.info(f"Search queries ({len(queries)}):")
    for query in queries:
        logger.info(f"  {query}")

    generator = TrustCandidateGenerator(rng=random.Random(seed), jitter=jitter)
    candidates = generator.find_candidates(profile.debt_type, profile)
    logger.info("")
    logger.info(f"Offline catalog candidates ({len(candidates)}):")
    for candidate in candidates:
        logger.info(f"  [{candidate.match_score:3d}] {candidate.name} ({candidate.trust_id})")
        for reason in candidate.match_reasons:
            logger.info(f"        - {reason}")
    logger.info("")
    logger.info("Run with --execute to query SEC EDGAR, OpenFIGI, CFPB, FRED and TRACE")


def _log_report(report: InvestigationReport, logger: logging.Logger) -> None:
    summary = report.summary
    logger.info("")
    logger.info(
        f"Status: {summary.status} | {summary.total_matches} matches, "
        f"{summary.high_confidence_matches} high-confidence | {summary.elapsed_ms} ms"
    )
    logger.info(f"Sources queried: {', '.join(summary.data_sources_queried) or 'none'}")
    if summary.source_errors:
        errors = ", ".join(f"{name}={count}" for name, count in summary.source_errors.items())
        logger.info(f"Source errors: {errors}")

    for i, trust in enumerate(report.trusts, 1):
        logger.info("")
        logger.info(f"{i}. {trust.name}  [confidence {trust.confidence_score:.0f}]")
        logger.info(f"   Trustee: {trust.trustee} | Sources: {', '.join(sorted(trust.sources))}")
        if trust.filing_link:
            logger.info(f"   Filing: {trust.filing_link}")
        for security in trust.securities[:3]:
            logger.info(f"   {security.id_type} {security.code} ({security.tranche})")
        if trust.trading_summary:
            ts = trust.trading_summary
            logger.info(
                f"   Trades: {ts.total_trades}, avg price {ts.average_price:.2f}, "
                f"latest {ts.latest_trade_date}"
            )

    for analysis in report.servicer_analysis:
        logger.info("")
        logger.info(
            f"Servicer {analysis.servicer_name}: {analysis.complaint_count} complaints "
            f"(risk {analysis.risk_level})"
        )

    if report.recommendations:
        logger.info("")
        logger.info("Recommendations:")
        for recommendation in report.recommendations:
            logger.info(f"  - {recommendation}")


def run_cache():
    """Entry point for abs-cache command."""
    parser = argparse.ArgumentParser(description="Manage the source cache")
    parser.add_argument("command", choices=["stats", "list", "clear"])
    parser.add_argument("--namespace", "-n", help="Filter by namespace")
    parser.add_argument("--limit", type=int, default=20, help="Limit for list")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    args = parser.parse_args()

    cache = AppCache(get_settings().cache_dir)
    try:
        _cache_command(cache, args)
    finally:
        cache.close()


def _cache_command(cache: AppCache, args: argparse.Namespace) -> None:
    if args.command == "stats":
        stats = cache.stats()
        print(f"Cache: {stats['cache_dir']}")
        print(f"  Total entries: {stats['total']}")
        print(f"  Size: {stats['size_mb']} MB")
        print("  By namespace:")
        for ns, count in sorted(stats["by_namespace"].items()):
            print(f"    {ns}: {count}")

    elif args.command == "list":
        keys = cache.keys(namespace=args.namespace, limit=args.limit)
        ns_label = args.namespace or "all"
        print(f"Keys ({ns_label}, limit {args.limit}):")
        for key in keys:
            print(f"  {key}")

    elif args.command == "clear":
        if not args.namespace:
            print("Specify --namespace to clear, or use 'rm -rf data/cache'")
            return
        if not args.yes:
            confirm = input(f"Clear all {args.namespace} entries? [y/N] ")
            if confirm.lower() != "y":
                print("Aborted")
                return
        count = cache.clear_namespace(args.namespace)
        print(f"Cleared {count} entries from {args.namespace}")
