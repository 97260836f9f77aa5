"""ghdep — review and act on Dependabot pull requests from the terminal."""
