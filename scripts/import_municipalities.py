#!/usr/bin/env python3
"""
Script to import the district / municipality reference list used by the
custom filter form.

The CSV must have a header row. Column names are matched case-insensitively
and both the Portuguese and English names are accepted:
``distrito``/``district`` and ``concelho``/``municipio``/``municipality``.

Usage:
    python import_municipalities.py [path_to_csv_file] [--debug]

If no path is provided, it will look for a file named 'municipios.csv' in the current directory.
"""

import os
import sys
import csv
import logging
from sqlalchemy.orm import Session

# Add the project root directory to Python's path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app.core.database import SessionLocal
from app.modules.tenders.models import Municipality

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

DISTRICT_COLUMNS = ("distrito", "district")
MUNICIPALITY_COLUMNS = ("concelho", "municipio", "município", "municipality")

def _pick(row, names):
    for key, value in row.items():
        if key and key.strip().lower() in names:
            return (value or "").strip()
    return ""

def parse_municipalities_csv(csv_file_path):
    """
    Parse the CSV file into district / municipality pairs.

    Rows without a municipality are skipped and duplicate pairs are kept once.

    Args:
        csv_file_path: Path to the CSV file

    Returns:
        List of dictionaries containing district and municipality
    """
    logger.info(f"Parsing CSV file: {csv_file_path}")

    with open(csv_file_path, newline='', encoding='utf-8-sig') as f:
        header = f.readline()
        f.seek(0)
        # Spreadsheet exports in pt-PT use semicolons
        delimiter = ";" if header.count(";") > header.count(",") else ","
        reader = csv.DictReader(f, delimiter=delimiter)

        seen = set()
        entries = []
        for row in reader:
            district = _pick(row, DISTRICT_COLUMNS)
            municipality = _pick(row, MUNICIPALITY_COLUMNS)
            if not municipality:
                continue
            key = (district, municipality)
            if key in seen:
                continue
            seen.add(key)
            entries.append({'district': district or None, 'municipality': municipality})

    logger.info(f"Successfully parsed {len(entries)} municipalities")
    return entries

def import_municipalities_to_db(entries, db: Session = None):
    """
    Import the municipalities into the database. Pairs already stored are left alone.

    Args:
        entries: List of dictionaries containing district and municipality
        db: Optional session; a new one is opened (and closed) when omitted

    Returns:
        Number of municipalities inserted
    """
    logger.info(f"Importing {len(entries)} municipalities to the database")

    owns_session = db is None
    if owns_session:
        db = SessionLocal()
    count_inserted = 0
    count_skipped = 0

    try:
        for entry in entries:
            existing = db.query(Municipality).filter(
                Municipality.district == entry['district'],
                Municipality.municipality == entry['municipality']
            ).first()

            if existing:
                count_skipped += 1
                continue

            db.add(Municipality(district=entry['district'], municipality=entry['municipality']))
            count_inserted += 1

            # Commit every 100 records
            if count_inserted % 100 == 0:
                db.commit()
                logger.info(f"Inserted {count_inserted} municipalities")

        # Commit any remaining records
        db.commit()
        logger.info(f"Import completed. Inserted: {count_inserted}, Already present: {count_skipped}")

        return count_inserted

    except Exception as e:
        logger.error(f"Error importing municipalities: {str(e)}")
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()

def main():
    """
    Main function to import municipalities from a CSV file.
    """
    # Check for debug flag
    debug_mode = "--debug" in sys.argv
    if debug_mode:
        logger.setLevel(logging.DEBUG)
        sys.argv.remove("--debug")

    # Get CSV file path from command-line argument or use default
    if len(sys.argv) > 1 and not sys.argv[1].startswith("--"):
        csv_file_path = sys.argv[1]
    else:
        csv_file_path = 'municipios.csv'

    if not os.path.isfile(csv_file_path):
        logger.error(f"CSV file not found: {csv_file_path}")
        sys.exit(1)

    try:
        entries = parse_municipalities_csv(csv_file_path)

        if not entries:
            logger.warning("No municipalities were found to import. Check the CSV header names.")
            sys.exit(1)

        count = import_municipalities_to_db(entries)

        logger.info(f"Successfully imported {count} municipalities")

    except Exception as e:
        logger.error(f"Import failed: {str(e)}")
        if debug_mode:
            logger.exception("Detailed traceback:")
        sys.exit(1)

if __name__ == "__main__":
    main()
