"""Banking bounded context: accounts, transactions and savings goals."""
