from weatherrec.cli import main

main()
