"""
cli - awstools command line interface
"""
