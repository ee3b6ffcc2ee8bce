# core/__init__.py
"""
core - aws-tools inventory core

Queries Route53 and EC2/EBS inventory APIs and flattens the results into
sortable tabular reports.

Layout:
    core/
    ├── aws/            # boto3 session/client factory
    ├── inventory/      # pagination, chunked lookups, joins, exports
    ├── io/             # RowSet and CSV/Excel writers
    ├── config.py       # runtime settings
    └── exceptions.py   # exception hierarchy

Usage:
    from core.aws import create_session, get_client
    from core.inventory import export_zone
    from core.io import write_csv

    session = create_session(settings)
    data = export_zone(get_client(session, "route53", settings), "Z1D633PJN98FT9")
    write_csv(sys.stdout, data)
"""

from core import aws, config, exceptions, inventory, io

__all__: list[str] = [
    # subpackages
    "aws",
    "inventory",
    "io",
    # modules
    "config",
    "exceptions",
]
