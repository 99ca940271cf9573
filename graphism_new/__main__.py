from graphism_new.cli import main

main()
