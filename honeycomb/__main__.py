from honeycomb.app import main

main()
