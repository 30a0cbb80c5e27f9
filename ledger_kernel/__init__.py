"""
Ledger Kernel

A small transactional ledger over profiles, contracts and jobs with:
- Atomic client-to-contractor payments
- At-most-once payment per job
- Exposure-bounded deposits
- Cent-exact money arithmetic
- Grouped earnings reports over time windows
"""

__version__ = "0.1.0"
