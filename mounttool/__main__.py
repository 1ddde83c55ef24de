from mounttool.launcher import main

main()
