"""Built-in character priority list.

Characters are listed from most to least likely to appear on a page:
printable ASCII, common CJK and full-width punctuation, then the most
frequent Chinese characters in descending order of corpus frequency.
Duplicates are harmless; the first occurrence decides the rank.
"""

ASCII_PRINTABLE = "".join(chr(code_point) for code_point in range(0x20, 0x7F))

CJK_PUNCTUATION = (
    "　、。《》「」『』【】"
    "！（），．：；？—…"
    "‘’“”·"
)

COMMON_HANZI = (
    "的一是不了人我在有他这中大来上国个到说们为子和你地出道也时年得就那要下以生"
    "会自着去之过家学对可她里后小么心多天而能好都然没日于起还发成事只作当想看文"
    "无开手十用主行方又如前所本见经头面公同三已老从动两长知民样现分将外但身些与"
    "高意进把法此实回二理美点月明其种声全工己话儿者向情部正名定女问力机给等几很"
    "业最间新什打便位因重被走电四第门相次东政海口使教西再平真听世气信北少关并内"
    "加化由却代军产入先山五太水万市眼体别处总才场师书比住员九笑性通目华报立马命"
    "张活难神数件安表原车白应路期叫死常提感金何更反合放做系计或司利受光王果亲界"
    "及今京务制解各任至清物台象记边共风战干接它许八特觉望直服毛林题建南度统色字"
    "请交爱让认算论百吃义科怎元社术结六功指思非流每青管夫连远资队跟带花快条院变"
    "联言权往展该领传近留红治决周保达办运武半候七必城父强步完革深区即求品士转量"
    "空甚众技轻程告江语英基派满式李息写呢识极令黄德收脸钱党倒未持音酒广"
)

DEFAULT_PRIORITY = ASCII_PRINTABLE + CJK_PUNCTUATION + COMMON_HANZI
