from clara.server import main

main()
