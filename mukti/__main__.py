from mukti.cli.app import main

main()
