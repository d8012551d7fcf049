"""
Feature modules: documents, schools, applications, and the proxy route.
"""
