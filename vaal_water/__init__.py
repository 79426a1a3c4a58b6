"""vaal_water package initializer.

This package contains the data pipeline behind the Vaal River water
quality dashboard.  Modules cover fetching the yearly CSV files,
parsing them into sample records, aggregation queries, status
classification and plotting helpers.  See individual module docstrings
for details.
"""
