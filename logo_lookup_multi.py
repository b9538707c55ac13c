"""
MULTI-COMPANY LOGO DOWNLOADER
---------------------------------------------------------
Finds and downloads logos for a list of companies using the
same source chain as the web app (website -> Wikipedia ->
logo APIs), then writes:

- a folder with one image per company found
- a zip of that folder
- an Excel download report

SETUP:
1. pip install -e .
2. Put company names in a .txt (one per line or comma separated),
   or in a .csv / .xlsx sheet with a "Company" or "Brand" column
3. Run:
      python logo_lookup_multi.py companies.xlsx
      python logo_lookup_multi.py --companies "Apple, Nike, Tesco"
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

from logo_archive import build_zip, named_logos
from logo_batch import BATCH_SIZE, ERROR, SUCCESS, LogoBatch, parse_companies

# ========== CONFIGURATION ==========
OUTPUT_PREFIX = "logos"
NAME_COLUMNS = ("company", "brand")

# =========================================================
# ------------------ HELPER FUNCTIONS ---------------------
# =========================================================

def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    for noisy in ("urllib3", "charset_normalizer"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def pick_name_column(df):
    for col in df.columns:
        if str(col).strip().lower() in NAME_COLUMNS:
            return col
    return df.columns[0]


def load_companies(path):
    """Company names from a .txt, .csv or .xlsx file, in file order."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".csv", ".xlsx", ".xls"):
        df = pd.read_csv(path) if suffix == ".csv" else pd.read_excel(path)
        df.columns = df.columns.astype(str).str.strip()
        if df.empty:
            return []
        names = df[pick_name_column(df)].dropna().astype(str).str.strip()
        return [n for n in names if n]

    return parse_companies(path.read_text(encoding="utf-8"))


def write_report(records, files, report_path):
    """`files` maps a record's position to the image file written for it."""
    rows = []
    for position, record in enumerate(records):
        rows.append({
            "Company": record.company,
            "Domain": record.domain,
            "Status": "FOUND" if record.status == SUCCESS else "NOT FOUND",
            "Source": record.source or "",
            "Content_Type": record.content_type or "",
            "Bytes": len(record.content) if record.content else 0,
            "File": files.get(position, ""),
        })

    output_df = pd.DataFrame(rows)
    with pd.ExcelWriter(report_path, engine="openpyxl") as writer:
        output_df.to_excel(writer, index=False, sheet_name="Download Report")
        worksheet = writer.sheets["Download Report"]

        # auto-size columns
        for column in worksheet.columns:
            max_length = max(len(str(cell.value or "")) for cell in column)
            worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 60)

    return output_df


# =========================================================
# ------------------ MAIN DOWNLOAD LOGIC ------------------
# =========================================================

def print_progress(records):
    done = sum(1 for r in records if r.status in (SUCCESS, ERROR))
    print(f"\r   {done}/{len(records)} looked up", end="", flush=True)


def download_logos(companies, output_dir, batch_size=BATCH_SIZE):
    print(f"\n{'=' * 70}")
    print(f"🎯 LOOKING UP LOGOS FOR {len(companies)} COMPANIES")
    print(f"{'=' * 70}")

    batch = LogoBatch(companies, batch_size=batch_size, on_update=print_progress)
    records = batch.run()
    print()

    output_folder = Path(output_dir)
    output_folder.mkdir(parents=True, exist_ok=True)

    files = {}
    for position, filename, record in named_logos(records):
        (output_folder / filename).write_bytes(record.content)
        files[position] = filename

    for i, record in enumerate(records):
        if record.status == SUCCESS:
            print(f"{i + 1:3d}. {record.company:<35} ✓ {record.source} → {files.get(i, '')}")
        else:
            print(f"{i + 1:3d}. {record.company:<35} ❌ Not found ({record.domain})")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M")
    zip_path = output_folder.with_name(f"{output_folder.name}_{timestamp}.zip")
    found = batch.successes()
    if found:
        zip_path.write_bytes(build_zip(records))

    report_path = output_folder.with_name(f"{output_folder.name}_report_{timestamp}.xlsx")
    write_report(records, files, report_path)

    print("\n📊 SUMMARY")
    print("------------------------------------------------------")
    print(f"   Found: {len(found)}")
    print(f"   Not Found: {len(records) - len(found)}")
    print(f"   Folder: {output_folder}/")
    if found:
        print(f"   Zip: {zip_path}")
    print(f"   Report: {report_path}")
    print("=======================================================")

    return records


def build_parser():
    parser = argparse.ArgumentParser(description="Download company logos in bulk.")
    parser.add_argument("input", nargs="?", help=".txt, .csv or .xlsx file with company names")
    parser.add_argument("--companies", help="Comma separated company names")
    parser.add_argument("--output", default=None, help="Output folder (default: logos_<timestamp>)")
    parser.add_argument("--batch-size", type=int, default=BATCH_SIZE, help="Companies looked up at once")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every source attempt")
    return parser


# =========================================================
# ---------------------- MAIN ENTRY -----------------------
# =========================================================

def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    companies = []
    if args.companies:
        companies.extend(parse_companies(args.companies))
    if args.input:
        if not Path(args.input).exists():
            print(f"❌ ERROR: {args.input} not found.")
            return 1
        try:
            companies.extend(load_companies(args.input))
        except (ValueError, OSError) as e:
            print(f"❌ ERROR reading {args.input}: {e}")
            return 1

    if not companies:
        print("❌ No company names given. Pass a file or --companies.")
        return 1

    output_dir = args.output or f"{OUTPUT_PREFIX}_{datetime.now().strftime('%Y%m%d_%H%M')}"
    download_logos(companies, output_dir, batch_size=args.batch_size)
    print("\n🎉 Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
