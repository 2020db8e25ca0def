"""Invoice-It backend: multi-tenant products, customers, quotations and invoices"""

__version__ = "1.0.0"
