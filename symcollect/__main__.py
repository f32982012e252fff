from symcollect.cli import main

main()
