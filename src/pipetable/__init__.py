"""Find, reformat, edit and convert pipe-delimited tables in plain-text documents."""
