"""Batch pipelines that read audio and write derived arrays."""
