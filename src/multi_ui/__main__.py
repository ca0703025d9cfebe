from multi_ui import main

main()
