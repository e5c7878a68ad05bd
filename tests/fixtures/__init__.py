"""Test fixtures for Darwin."""
