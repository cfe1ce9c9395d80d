from preprod_engine.cli import main

main()
