from locust_tui.cli import main

main()
