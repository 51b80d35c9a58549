from egawari.cli import main

main()
