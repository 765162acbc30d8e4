"""Domain layer for the sites context.

Pure value objects, the built-in country packs and the derived artifact
generators. Nothing here depends on boto3 or FastAPI.
"""
