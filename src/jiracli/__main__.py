from jiracli.main import main

main()
