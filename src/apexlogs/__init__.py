"""apexlogs - Salesforce Apex debug log catalog and export."""

__version__ = "0.1.0"
