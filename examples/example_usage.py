#!/usr/bin/env python3
"""
Example usage of the Invoice CSV Export package
Parses sample invoice text and writes the CSV ZIP next to this script.
"""

import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from invoice_export import InvoiceParser, build_archive
from invoice_export.cli import invoice_to_dict


def create_sample_invoice_text():
    """Create sample invoice text as a PDF extractor would return it."""
    return """
    NORTHSIDE HVAC SERVICES
    88 Industrial Pkwy
    Columbus, OH 43215

    Invoice No. 20931
    Date: 11/02/24
    Customer: Riverside Apartments LLC
    Salesperson: Dana Kowalski    Terms: Net 30

    ACTIVITY        DESCRIPTION                     QTY    RATE       AMOUNT
    SVC-CALL        Diagnostic visit                1      95.00      95.00
    PART/CAP        Dual run capacitor 45/5 MFD     2      $38.50     $77.00
                    (replaced on units 4B and 7A)
    LABOR           Technician labor                3.5    110.00     385.00
    Subtotal                                                          557.00
    Sales Tax                                                         36.21
    Total                                                             $593.21
    """


def main():
    parser = InvoiceParser()
    invoice = parser.parse_text(create_sample_invoice_text())

    print("Parsed invoice:")
    print(json.dumps(invoice_to_dict(invoice), indent=2))

    archive = build_archive(invoice)
    target = Path(__file__).parent / archive.filename
    target.write_bytes(archive.content)
    print(f"\nSaved {target}")


if __name__ == "__main__":
    main()
