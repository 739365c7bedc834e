"""Run the nocalhost-local command line tool."""

from nocalhost_local.tool.nocalhost_local import main

if __name__ == "__main__":
    main()
