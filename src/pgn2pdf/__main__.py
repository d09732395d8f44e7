from pgn2pdf import main

main()
