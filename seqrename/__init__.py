"""
seqrename - Sequential Batch Rename Tool

Renames a batch of files to prefix + zero-padded number (+ original extension)
with a full conflict preview before anything on disk is touched.
"""

__version__ = "1.0.0"
