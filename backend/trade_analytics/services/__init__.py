"""
Service layer modules.

These modules encapsulate the strategy optimization logic:
- Querying a user's trades over the trailing window
- Aggregating win rates per strategy and outcomes per risk level
- Correlating risk score with trade outcome
- Turning those statistics into advisory suggestions
- Assembling the final optimization report
"""
