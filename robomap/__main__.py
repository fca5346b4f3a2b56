from robomap.cli import main

main()
