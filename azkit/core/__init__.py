# flake8: noqa
"""
The pieces shared by every azkit client: the HTTP pipeline and its policies,
operation descriptors, errors, pagination and long running operation polling.
"""
