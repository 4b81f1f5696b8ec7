"""
Atom naming table for modified nucleotide residues.

Each row holds the residue code, its two base atoms and, for residues whose
sugar-phosphate backbone does not use the standard atom names, the nine
second-residue backbone names. Rows with ``None`` use the standard backbone.

Generated from the DNATCO residue catalogue; edit the catalogue, not this file.
"""

NON_STANDARD_RESIDUES: tuple[tuple[str, tuple[str, str], tuple[str, ...] | None], ...] = (
    ("05A", ("N1", "C6"), ("C3", "N2", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("05H", ("N1", "C2"), ("C71", "N5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("05K", ("N1", "C2"), ("C71", "N5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("0AU", ("N1", "C6"), None),
    ("0U", ("N1", "C6"), None),
    ("0U1", ("N1", "C6"), None),
    ("128", ("N9", "C4"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("1RN", ("N1", "C6"), None),
    ("1TL", ("N1", "C6"), None),
    ("1W5", ("C1", "C2"), None),
    ("2DF", ("N1", "O2"), None),
    ("2LA", ("N9", "C8"), None),
    ("2OM", ("N1", "C6"), None),
    ("3MU", ("N1", "C6"), None),
    ("3TD", ("C5", "C4"), None),
    ("4EN", ("N8", "N9"), None),
    ("4MF", ("N1", "C7A"), None),
    ("56B", ("N9", "C8"), None),
    ("5FA", ("N9", "C4"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("5NC", ("N1", "C6"), None),
    ("5UA", ("N9", "C4"), ("C6'", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("64P", ("N1", "C6"), None),
    ("64T", ("N1", "O2"), None),
    ("6FK", ("N9", "C8"), None),
    ("6FM", ("N9", "C4"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("6FU", ("N1", "C6"), None),
    ("6HA", ("N9", "C4"), None),
    ("6HC", ("N1", "C6"), None),
    ("6HG", ("N9", "C4"), None),
    ("6HT", ("N1", "C6"), None),
    ("6MI", ("N1M", "C8A"), None),
    ("7AT", ("N9", "N8"), None),
    ("7MG", ("N9", "C8"), None),
    ("7SN", ("N9", "C8"), None),
    ("8AA", ("N9", "C8"), None),
    ("8AG", ("N9", "C8"), None),
    ("8AZ", ("N9", "N8"), None),
    ("8MG", ("N9", "C8"), None),
    ("8PY", ("N9", "C8"), None),
    ("8RO", ("N1", "C6"), None),
    ("8YN", ("C1", "C2"), None),
    ("93D", ("C1", "C6"), None),
    ("9V9", ("N1", "C6"), None),
    ("A1P", ("N9", "C4"), ("O2P", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("A3P", ("N9", "C4"), ("P2", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("A6C", ("N1", "C6"), None),
    ("A6U", ("N1", "C6"), None),
    ("A7C", ("N9", "N8"), None),
    ("A7E", ("N9", "N8"), None),
    ("AD2", ("N9", "C4"), ("P1", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("ADX", ("N9", "C4"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("B8H", ("C5", "C4"), None),
    ("B8K", ("N9", "C8"), None),
    ("B8N", ("C5", "C4"), None),
    ("B8Q", ("N1", "C6"), None),
    ("B9H", ("N1", "C6"), None),
    ("BGH", ("N9", "C8"), None),
    ("BGM", ("N9", "C8"), None),
    ("BMN", ("C1", "C6"), None),
    ("BMQ", ("N1", "C6"), None),
    ("C36", ("N1", "C6"), None),
    ("C4J", ("C5", "C4"), None),
    ("CAR", ("N1", "C6"), None),
    ("CDW", ("N1", "C6"), None),
    ("CGY", ("C1", "C2"), None),
    ("CJ1", ("N9", "C8"), None),
    ("CSF", ("N1", "C2"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("CSM", ("N1", "C6"), None),
    ("CTG", ("N1", "C2"), None),
    ("CVC", ("N9", "C4"), None),
    ("D3", ("N1A", "C5A"), None),
    ("D33", ("N1", "C4"), None),
    ("D3N", ("N1", "C6"), None),
    ("DFT", ("C1", "C6"), None),
    ("DGI", ("N9", "C4"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("DPY", ("C1", "C2"), None),
    ("DRP", ("C1", "C2"), None),
    ("DZ", ("C1", "C6"), None),
    ("E3C", ("N1", "C6"), None),
    ("E7G", ("N9", "C8"), None),
    ("EDC", ("N1", "C6"), None),
    ("ENP", ("N9", "C4"), ("P1", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("EW3", ("N1", "C6"), None),
    ("F2T", ("N1", "C6"), None),
    ("F3H", ("N1", "C6"), None),
    ("FAG", ("N9", "C4"), ("O3P", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("FFD", ("C6", "C5"), None),
    ("FHU", ("C5", "F5"), None),
    ("G4P", ("N9", "C4"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("GMX", ("N9", "C4"), ("OP3", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("GN7", ("N7", "C4"), None),
    ("I2T", ("C5", "C4"), None),
    ("IC", ("N1", "C6"), None),
    ("IMC", ("N1", "C6"), None),
    ("IOO", ("N9", "C1'"), ("P", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C2", "O4'")),
    ("IRN", ("N1", "C4"), None),
    ("J4T", ("N1", "C6"), None),
    ("JLN", ("N1", "C4"), None),
    ("JMH", ("N1", "C6"), None),
    ("JSP", ("C1", "C2"), None),
    ("LCC", ("N1", "C6"), None),
    ("LHO", ("N1", "C4"), None),
    ("LMS", ("N9", "C4"), ("S", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("MBZ", ("N1", "C9"), None),
    ("MDJ", ("N1", "C2"), None),
    ("MDK", ("N1", "C2"), None),
    ("MDQ", ("N1", "C6"), None),
    ("MDU", ("N1", "C6"), None),
    ("ME6", ("N1", "C6"), None),
    ("MFO", ("N9", "C8"), None),
    ("MFT", ("N1", "C6"), None),
    ("MGQ", ("N9", "C4"), ("PBE", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("MHG", ("N9", "C8"), None),
    ("MM7", ("C1", "C2"), None),
    ("MMT", ("N1", "C2"), ("NP", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("MTR", ("C1", "C6"), None),
    ("MTU", ("N9", "C8"), None),
    ("N5I", ("NE1", "CE2"), None),
    ("N6G", ("N9", "C8"), None),
    ("NCU", ("N1", "C6"), None),
    ("NF2", ("C1", "C2"), None),
    ("NP3", ("N1", "C2"), None),
    ("NTT", ("N1", "C6"), None),
    ("OAD", ("N9", "C4"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("OKQ", ("N1", "C2"), ("P1", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("ONE", ("N1", "C6"), None),
    ("P2U", ("C5", "C4"), None),
    ("P7G", ("N9", "C8"), None),
    ("PBT", ("N1", "O2"), None),
    ("PSU", ("C5", "C4"), None),
    ("PYY", ("C1", "C2"), None),
    ("QBT", ("N1", "C6"), None),
    ("QCK", ("N1", "C6"), None),
    ("RCE", ("N1", "C6"), None),
    ("RIA", ("O2A", "O3A"), ("P'", "O5'", "C5'", "C4'", "O1'", "C3'", "O3'", "C1'", "O4'")),
    ("RTP", ("N1", "C5"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("SAY", ("CAA", "CAF"), None),
    ("T0T", ("C1", "C6"), None),
    ("TDY", ("N1", "C6"), None),
    ("TFF", ("N1", "C2"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("THP", ("N1", "C2"), ("P2", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("TLB", ("N1", "C6"), None),
    ("TLC", ("N1", "C6"), None),
    ("TLN", ("N1", "C6"), None),
    ("TPG", ("N9", "C4"), ("PAT", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("U23", ("N1", "C6"), None),
    ("UBD", ("N1", "C6"), ("P1", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("UDP", ("N1", "C6"), ("PA", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")),
    ("UF2", ("N1", "C6"), None),
    ("UMS", ("N1", "C6"), None),
    ("UMX", ("N1", "C6"), None),
    ("UOB", ("N1", "C6"), None),
    ("UR3", ("N1", "C6"), None),
    ("URX", ("N1", "C6"), None),
    ("US4", ("N1", "C6"), None),
    ("USM", ("N1", "C6"), None),
    ("UVX", ("N1", "C6"), None),
    ("UY1", ("C5", "C4"), None),
    ("WC7", ("N1", "C4"), None),
    ("XAE", ("N9", "C8"), None),
    ("XCS", ("C8", "C6"), None),
    ("XTY", ("C8", "C6"), None),
)
