"""Serializable summaries of kernel output."""
