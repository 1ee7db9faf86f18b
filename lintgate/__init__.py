"""lintgate: normalize static-analysis reports into editor diagnostics."""
