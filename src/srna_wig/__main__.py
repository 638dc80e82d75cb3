from srna_wig.cli import main

main()
