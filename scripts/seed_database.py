# Script to fill a development database with reproducible sample events.
# Usage example:
# python scripts/seed_database.py --db dev.db --seed 42
import sys
import argparse
import random
from datetime import datetime, timezone

from sat_tracker.db import Database
from sat_tracker.db_config import DatabaseLocation
from sat_tracker.seed import seed_store
from sat_tracker.services.storage import StorageService

def main():
    parser = argparse.ArgumentParser(description='Seed a sat tracker database with sample events')
    parser.add_argument('--db', default='sat_tracker.db', help='Path to the SQLite database file')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible data')

    args = parser.parse_args()

    database = Database()
    try:
        database.init(DatabaseLocation(path=args.db).to_connection_string())
        with database.session() as session:
            transactions, fees = seed_store(
                StorageService(session),
                random.Random(args.seed),
                datetime.now(timezone.utc)
            )
        print(f"\nCreated {transactions} transactions and {fees} on-chain fees in {args.db}\n")
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)
    finally:
        database.dispose()

if __name__ == '__main__':
    main()
