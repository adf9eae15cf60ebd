"""Standard Thai province names and the default alias seed table.

``STANDARD_PROVINCES`` is the closed set of 77 first-level administrative
names every resolved province must belong to. ``DEFAULT_PROVINCE_ALIASES``
is the seed a caller loads into its own alias store; the resolver itself
only ever uses the table passed to it.
"""

from __future__ import annotations

DEFAULT_PROVINCE_ALIASES: dict[str, list[str]] = {
    "กรุงเทพมหานคร": [
        "bangkok", "bkk", "กทม", "กทม.", "กรุงเทพ", "กรุงเทพฯ",
        "krungthep", "krung thep", "กท.", "กรุงเทพมหานครฯ",
    ],
    "กระบี่": ["krabi", "กระบี"],
    "กาญจนบุรี": ["kanchanaburi", "kanchanaburi province", "กาญจน์", "กจ."],
    "กาฬสินธุ์": ["kalasin", "kalasin province", "กส.", "กาฬสินทุ์"],
    "กำแพงเพชร": ["kamphaeng phet", "กำแพง", "กพ."],
    "ขอนแก่น": ["khon kaen", "khonkaen", "ขก."],
    "จันทบุรี": ["chanthaburi", "จบ.", "จันท์"],
    "ฉะเชิงเทรา": ["chachoengsao", "ฉช.", "ฉะเชิง"],
    "ชลบุรี": ["chonburi", "chon buri", "ชบ."],
    "ชัยนาท": ["chainat", "chai nat", "ชน."],
    "ชัยภูมิ": ["chaiyaphum", "chaiya phum", "ชย."],
    "ชุมพร": ["chumphon", "chumporn", "ชพ."],
    "เชียงราย": ["chiang rai", "chiangrai", "ชร."],
    "เชียงใหม่": ["chiang mai", "chiangmai", "ชม.", "เชียงใหม"],
    "ตรัง": ["trang"],
    "ตราด": ["trat"],
    "ตาก": ["tak"],
    "นครนายก": ["nakhon nayok", "นย."],
    "นครปฐม": ["nakhon pathom", "นฐ."],
    "นครพนม": ["nakhon phanom", "นพ."],
    "นครราชสีมา": ["nakhon ratchasima", "korat", "โคราช", "นม.", "นครราชสีม"],
    "นครศรีธรรมราช": ["nakhon si thammarat", "nakhon sri thammarat", "นศ.", "เทศบาลนครนครศรีธรรมราช"],
    "นครสวรรค์": ["nakhon sawan", "นว."],
    "นนทบุรี": ["nonthaburi", "นบ.", "นนท์"],
    "นราธิวาส": ["narathiwat", "นธ."],
    "น่าน": ["nan"],
    "บึงกาฬ": ["bueng kan", "buengkan", "บก."],
    "บุรีรัมย์": ["buri ram", "buriram", "บร."],
    "ปทุมธานี": ["pathum thani", "pathumthani", "ปท."],
    "ประจวบคีรีขันธ์": ["prachuap khiri khan", "prachuap", "ปข."],
    "ปราจีนบุรี": ["prachin buri", "prachinburi", "ปจ."],
    "ปัตตานี": ["pattani", "ปน."],
    "พระนครศรีอยุธยา": ["phra nakhon si ayutthaya", "ayutthaya", "ayuthaya", "อยุธยา", "อย."],
    "พังงา": ["phang nga", "phangnga", "พง."],
    "พัทลุง": ["phatthalung", "พท."],
    "พิจิตร": ["phichit", "พจ."],
    "พิษณุโลก": ["phitsanulok", "พล."],
    "เพชรบุรี": ["phetchaburi", "พบ."],
    "เพชรบูรณ์": ["phetchabun", "พช."],
    "แพร่": ["phrae"],
    "พะเยา": ["phayao", "พย."],
    "ภูเก็ต": ["phuket", "phukett", "ภก."],
    "มหาสารคาม": ["maha sarakham", "mahasarakham", "มค."],
    "มุกดาหาร": ["mukdahan", "มห."],
    "แม่ฮ่องสอน": ["mae hong son", "maehongson", "มส."],
    "ยโสธร": ["yasothon", "ยส."],
    "ยะลา": ["yala", "ยล."],
    "ร้อยเอ็ด": ["roi et", "roiet", "รอ."],
    "ระนอง": ["ranong", "รน."],
    "ระยอง": ["rayong", "รย."],
    "ราชบุรี": ["ratchaburi", "ratburi", "รบ."],
    "ลพบุรี": ["lopburi", "lop buri", "ลบ."],
    "ลำปาง": ["lampang", "ลป."],
    "ลำพูน": ["lamphun", "ลพ."],
    "เลย": ["loei", "ลย."],
    "ศรีสะเกษ": ["si sa ket", "sisaket", "ศก."],
    "สกลนคร": ["sakon nakhon", "sakonnakhon", "สน."],
    "สงขลา": ["songkhla", "สข."],
    "สตูล": ["satun", "สต."],
    "สมุทรปราการ": ["samut prakan", "samutprakan", "สป."],
    "สมุทรสงคราม": ["samut songkhram", "samutsongkhram", "สส."],
    "สมุทรสาคร": ["samut sakhon", "samutsakhon", "สค."],
    "สระแก้ว": ["sa kaeo", "sakaeo", "สก."],
    "สระบุรี": ["saraburi", "sara buri", "สบ."],
    "สิงห์บุรี": ["sing buri", "singburi", "สห."],
    "สุโขทัย": ["sukhothai", "สท."],
    "สุพรรณบุรี": ["suphan buri", "suphanburi", "สพ."],
    "สุราษฎร์ธานี": ["surat thani", "suratthani", "สฎ."],
    "สุรินทร์": ["surin", "สร."],
    "หนองคาย": ["nong khai", "nongkhai", "หค."],
    "หนองบัวลำภู": ["nong bua lamphu", "nongbualamphu", "หบ."],
    "อ่างทอง": ["ang thong", "angthong", "อท."],
    "อำนาจเจริญ": ["amnat charoen", "amnatcharoen", "อจ."],
    "อุดรธานี": ["udon thani", "udonthani", "อด."],
    "อุตรดิตถ์": ["uttaradit", "อต."],
    "อุทัยธานี": ["uthai thani", "uthaitthani", "อน."],
    "อุบลราชธานี": ["ubon ratchathani", "ubon", "อบ."],
}

STANDARD_PROVINCES: tuple[str, ...] = tuple(DEFAULT_PROVINCE_ALIASES)

TOTAL_PROVINCES = 77

# Bucket label for sales whose province could not be resolved
UNKNOWN_PROVINCE = "ไม่ระบุจังหวัด"
