"""
Analytics App - Summaries, Fuel Statistics and Tax Estimates

Read-only computations over the record store. Every endpoint recomputes
from the full current collections; nothing is cached.

Key Features:
- Daily, weekly, monthly and yearly summaries
- Period-over-period comparison with percent change
- Transaction ledger and activity history
- Fuel MPG, cost per mile and monthly average
- Marginal-bracket income tax estimate with quarterly payments
"""
