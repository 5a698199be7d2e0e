"""coldcheck - Cold-storage temperature compliance records.

Sections, refrigeration units and responsible contacts, periodic compliance
reports, range aggregation and CSV export.
"""

__version__ = "0.1.0"
