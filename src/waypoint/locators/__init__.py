"""Discovery sources for project roots.

Each locator scans configured base folders for one kind of root:

    vscode.py   # folders holding a .vscode/ workspace directory
    git.py      # Git working trees (.git directory or worktree file)
    svn.py      # Subversion working copies (.svn directory)
"""
