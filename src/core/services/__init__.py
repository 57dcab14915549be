"""Services: extraction, deserialization, authorization and fetch orchestration."""
