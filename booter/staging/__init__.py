"""Staging — reset the working areas and materialize a submission into them.

- prepare_workspace: destructively reset the staging and logs directories
- materialize: extract an archive or copy a directory into the staging area
"""
