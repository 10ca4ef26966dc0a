"""SwiftFix repair-shop booking core: funnel, ledger, catalog and reporting."""
