"""
Infrastructure layer.

Adapters implementing the domain ports: SQLAlchemy persistence and
HTTP clients for MTN MOMO, exchange rates, Alpha Vantage and Mailgun.
"""
