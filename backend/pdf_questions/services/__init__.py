"""Service layer: LLM access and the processing pipeline."""
