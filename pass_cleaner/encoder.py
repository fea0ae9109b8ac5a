"""Write entries back out as a browser-importable CSV."""

import pandas as pd

from pass_cleaner.models import EXPORT_HEADER

OUTPUT_FILENAME = 'cleaned_passwords.csv'
OUTPUT_MIME_TYPE = 'text/csv'


def encode_csv(entries):
    """Serialize entries to CSV text with the fixed export header.

    Rows end in CRLF so the writer quotes any value holding a bare CR or
    LF. Triage status is not part of the export.
    """
    df = pd.DataFrame([entry.to_row() for entry in entries],
                      columns=list(EXPORT_HEADER), dtype=object)
    return df.to_csv(index=False, lineterminator='\r\n')


def save_csv(entries, output_path, logger=None):
    """Encode entries and write them to output_path as UTF-8."""
    csv_text = encode_csv(entries)
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(csv_text)
    if logger:
        logger.info(f"Wrote {len(entries)} entries to: {output_path}")
    return output_path
