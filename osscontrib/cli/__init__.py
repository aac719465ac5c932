# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
osscontrib CLI

Usage:
    osscontrib show octocat --sort latest --state merged
    osscontrib share octocat
    osscontrib config set base_url https://oss.example.com
"""
