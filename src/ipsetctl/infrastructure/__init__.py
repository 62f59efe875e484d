"""Infrastructure layer — IP set store clients.

This layer depends on stdlib and third-party libs (boto3, botocore).
It must never import from domain, services, commands, or output.
The service layer bridges between domain rules and the store.
"""
