from kboot.main import main

main()
