from kappa.repl import main

main()
