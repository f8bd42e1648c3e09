"""Command-line entry point"""
import argparse
import json
import logging
import sys
import traceback
from dataclasses import asdict

from sat_tracker.activity import get_activity_metrics
from sat_tracker.config import settings
from sat_tracker.db import db
from sat_tracker.importer import CsvImporter
from sat_tracker.services.overview import OverviewService
from sat_tracker.services.storage import StorageService
from sat_tracker.utils.json_encoder import DateTimeEncoder

logging.basicConfig(level=settings.LOG_LEVEL, format='%(message)s')
logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='sat_tracker', description='Bitcoin stacking tracker')
    subparsers = parser.add_subparsers(dest='command', required=True)

    analyze = subparsers.add_parser('analyze', help='Preview an exchange CSV export without importing')
    analyze.add_argument('file', help='Path to the CSV export')

    import_cmd = subparsers.add_parser('import', help='Import an exchange CSV export')
    import_cmd.add_argument('file', help='Path to the CSV export')

    subparsers.add_parser('metrics', help='Show stacking activity metrics')
    subparsers.add_parser('overview', help='Show portfolio overview')
    return parser

def run(argv=None) -> None:
    """Run one command and print its result as JSON."""
    args = build_parser().parse_args(argv)

    try:
        db.init()
        session = db.get_session()

        try:
            store = StorageService(session)

            if args.command == 'analyze':
                result = CsvImporter(store, settings).analyze_file(args.file).model_dump()
            elif args.command == 'import':
                created = CsvImporter(store, settings).import_file(args.file)
                result = [asdict(tx) for tx in created]
            elif args.command == 'metrics':
                result = get_activity_metrics(store).model_dump()
            else:
                result = OverviewService(session).get_overview_metrics().model_dump()
        finally:
            session.close()

        print(json.dumps(result, indent=2, cls=DateTimeEncoder))

    except Exception as e:
        logger.error(f"Error running {args.command}: {e}")
        traceback.print_exc()
        sys.exit(1)
    finally:
        db.dispose()

if __name__ == "__main__":
    run()
