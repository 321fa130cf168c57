"""Reports generated from schedule export files."""
