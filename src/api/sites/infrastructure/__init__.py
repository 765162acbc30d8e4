"""Infrastructure layer for the sites context: the DynamoDB single-table adapter."""
