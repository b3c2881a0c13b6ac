"""Element and attribute classification tables.

These read-only sets drive the recovery decisions of the tag balancer and the
attribute parser. They are built once at import time and shared by every
parse, so they must never be mutated.
"""

from typing import FrozenSet


def _names(spec: str) -> FrozenSet[str]:
    return frozenset(spec.split(","))


# Elements that cannot contain children and are never left open
VOID_ELEMENTS = _names(
    "area,base,basefont,br,col,frame,hr,img,input,isindex,link,meta,param,embed"
)

BLOCK_ELEMENTS = _names(
    "address,article,applet,aside,audio,blockquote,button,canvas,center,dd,"
    "del,dir,div,dl,dt,fieldset,figcaption,figure,footer,form,frameset,"
    "h1,h2,h3,h4,h5,h6,header,hgroup,hr,iframe,ins,isindex,li,map,menu,"
    "noframes,noscript,object,ol,output,p,pre,section,script,table,tbody,"
    "td,tfoot,th,thead,tr,ul,video"
)

INLINE_ELEMENTS = _names(
    "a,abbr,acronym,applet,b,basefont,bdo,big,br,button,cite,code,del,dfn,"
    "em,font,i,iframe,img,input,ins,kbd,label,map,object,q,s,samp,script,"
    "select,small,span,strike,strong,sub,sup,textarea,tt,u,var"
)

# Elements whose closing tag may be omitted: reopening one closes the previous
CLOSE_SELF_ELEMENTS = _names(
    "colgroup,dd,dt,li,options,p,td,tfoot,th,thead,tr"
)

# Boolean attributes: bare presence means disabled="disabled"
FILL_ATTRIBUTES = _names(
    "checked,compact,declare,defer,disabled,ismap,multiple,nohref,noresize,"
    "noshade,nowrap,readonly,selected"
)

# Elements whose content is consumed verbatim up to their closing tag
RAW_TEXT_ELEMENTS = _names("script,style")

EMPTY_SET: FrozenSet[str] = frozenset()
