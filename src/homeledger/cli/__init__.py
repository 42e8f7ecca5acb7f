"""
Command Line Interface Package

Unified CLI for the home ledger.

Command Structure:
- homeledger: Main entry point with utility commands (version, config, status, init, save)
- homeledger concepts: Show and edit the expense/income taxonomies
- homeledger records: List, add, edit and remove records
- homeledger stats: Concept summaries and counterparty histories

Every editing command loads the data directory, applies one change and
writes back only the files that changed.
"""
