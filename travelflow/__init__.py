"""Travel and in-valley expense reimbursement workflow service."""

__version__ = "1.0.0"
