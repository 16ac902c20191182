from clawslack.cli import main

main()
