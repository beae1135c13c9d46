"""Framework adapters for responsecache."""
