from solid_scaffold.cli import main

main()
