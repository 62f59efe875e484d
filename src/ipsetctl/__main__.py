from ipsetctl.cli import main

main()
