from currency_window.cli import main

main()
