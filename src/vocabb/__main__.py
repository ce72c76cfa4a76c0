from vocabb.interface.cli import main

main()
