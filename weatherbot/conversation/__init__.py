"""Turn orchestration, entity selection and context storage."""
