"""Process management — discover, install and boot sub-projects.

- discover_manifests: find every package.json outside vendored/VCS trees
- DependencyInstaller: run the install command per project, one at a time
- resolve_launch_spec: pick the script a project boots with
- ProcessOrchestrator: spawn all projects, stream their output to logs and console
"""
