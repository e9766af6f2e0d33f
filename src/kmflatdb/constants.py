import re

# EMBL spacer lines, discarded while indexing
BLANK_TAG = 'XX'

# RN, RA, RT, RL ... are all collected under one key
REFERENCE_TAG = 'R'
REFERENCE_PATTERN = re.compile(r'^R.')

NCBI_TOP_TAG = re.compile(r'[A-Za-z/]')

NCBI = 'ncbi'
EMBL = 'embl'
STYLES = (NCBI, EMBL)

NCBI_TAGSIZE = 12
EMBL_TAGSIZE = 5

ENTRY_DELIMITER = '\n//\n'
KEGG_DELIMITER = '\n///\n'
