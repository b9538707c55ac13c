"""
Logo Finder (Flask)
---------------------------------
GET  /api/fetch-logo?company=Apple[&source=2][&fallback=0][&icon=1]
     -> the logo image, or JSON 404 listing the sources tried
POST /api/fetch-logos  {"companies": [...]}
     -> {"results": [{company, domain, success, source, type}, ...]}
POST /api/archive      {"companies": ["Apple", {"company": "Nike", "sourceIndex": 3}]}
     -> zip of every logo found, each from its pinned source when given
"""

import io
import logging

from flask import Flask, Response, jsonify, render_template_string, request, send_file

from domains import company_to_domain
from logo_archive import archive_name, build_zip
from logo_batch import BATCH_SIZE, SUCCESS, LogoBatch
from logo_resolver import resolve_logo
from logo_sources import TOTAL_SOURCES

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 1 * 1024 * 1024  # JSON bodies only

CACHE_CONTROL = "public, max-age=86400"
FALSE_VALUES = {"0", "false", "no", "off"}


# --- Helpers ---
def flag(name, default):
    value = request.args.get(name)
    if value is None:
        return default
    return value.strip().lower() not in FALSE_VALUES


def read_companies():
    """Company list from a JSON body, or None if the payload is malformed."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    companies = data.get("companies")
    if not isinstance(companies, list) or not all(isinstance(c, str) for c in companies):
        return None
    return [c.strip() for c in companies if c.strip()]


def read_archive_entries():
    """
    (company, source_index) pairs for /api/archive, or None if malformed.

    Entries are plain names (full source chain) or {"company", "sourceIndex"}
    objects pinning the source the logo was shown from.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("companies"), list):
        return None

    entries = []
    for item in data["companies"]:
        if isinstance(item, str):
            company, source_index = item, None
        elif isinstance(item, dict) and isinstance(item.get("company"), str):
            company, source_index = item["company"], item.get("sourceIndex")
            if source_index is not None and (isinstance(source_index, bool) or not isinstance(source_index, int)):
                return None
        else:
            return None
        if company.strip():
            entries.append((company.strip(), source_index))
    return entries


# --- Template ---
TEMPLATE = r"""
<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>Logo Finder</title>
<meta name="viewport" content="width=device-width,initial-scale=1">
<style>
body{margin:0;font-family:Inter,sans-serif;background:#0b0f14;color:#cfd8dc;}
.wrap{max-width:1100px;margin:20px auto;padding:20px;}
h1{color:#22c1ff;margin:0 0 12px;}
textarea{width:100%;height:140px;border-radius:8px;background:#1c1f26;color:#cfd8dc;border:1px solid #333;padding:8px;}
button{border-radius:6px;padding:6px 12px;border:1px solid #333;background:#1c1f26;color:#cfd8dc;cursor:pointer;}
.grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(170px,1fr));gap:14px;margin-top:20px;}
.card{background:#1c1f26;border-radius:10px;padding:10px;text-align:center;}
.card.error{box-shadow:0 0 0 2px #dc143c;}
.imageWrap{height:100px;display:flex;align-items:center;justify-content:center;background:#fff;border-radius:8px;margin-bottom:6px;}
.imageWrap img{max-width:90%;max-height:90px;object-fit:contain;}
.small{font-size:12px;color:#888;overflow:hidden;text-overflow:ellipsis;white-space:nowrap;}
</style>
</head>
<body>
<div class="wrap">
  <h1>Logo Finder</h1>
  <textarea id="companies" placeholder="One company per line or comma separated"></textarea>
  <p>
    <input type="file" id="fileInput" accept=".txt,.csv">
    <button id="findBtn">Find logos</button>
    <button id="zipBtn" style="display:none">Download all</button>
    <span id="summary" class="small"></span>
  </p>
  <div id="grid" class="grid"></div>
</div>
<script>
const TOTAL_SOURCES={{ total_sources }}, BATCH_SIZE={{ batch_size }};
let logos=[];
const grid=document.getElementById('grid');

document.getElementById('fileInput').onchange=async e=>{
  const f=e.target.files[0]; if(!f)return;
  const box=document.getElementById('companies');
  box.value+=(box.value?'\n':'')+await f.text();
};

function parseCompanies(text){return text.split(/[\n,]/).map(s=>s.trim()).filter(Boolean);}

function render(){
  grid.innerHTML='';
  logos.forEach((l,i)=>{
    const card=document.createElement('div');
    card.className='card'+(l.status==='error'?' error':'');
    const wrap=document.createElement('div');wrap.className='imageWrap';
    if(l.status==='success'){const img=document.createElement('img');img.src=l.url;wrap.appendChild(img);}
    else wrap.textContent=l.status==='error'?'not found':'...';
    card.appendChild(wrap);
    const name=document.createElement('div');name.textContent=l.company;card.appendChild(name);
    const meta=document.createElement('div');meta.className='small';
    meta.textContent=l.source?`${l.domain} · ${l.source}`:(l.domain||'');card.appendChild(meta);
    if(l.status==='success'||l.status==='error'){
      const retry=document.createElement('button');retry.textContent='Try another source';
      retry.onclick=()=>fetchLogo(i,((l.sourceIndex??0)+1)%TOTAL_SOURCES);
      card.appendChild(retry);
    }
    grid.appendChild(card);
  });
  const ok=logos.filter(l=>l.status==='success').length;
  document.getElementById('summary').textContent=logos.length?`${ok} of ${logos.length} found`:'';
  document.getElementById('zipBtn').style.display=ok?'inline-block':'none';
}

function update(i,changes){logos=logos.map((l,j)=>j===i?{...l,...changes}:l);render();}

async function fetchLogo(i,sourceIndex){
  update(i,{status:'loading'});
  let url=`/api/fetch-logo?company=${encodeURIComponent(logos[i].company)}`;
  if(sourceIndex!==undefined)url+=`&source=${sourceIndex}`;
  try{
    const res=await fetch(url);
    if(res.ok){
      const blob=await res.blob();
      update(i,{status:'success',url:URL.createObjectURL(blob),domain:res.headers.get('X-Logo-Domain'),
        source:res.headers.get('X-Logo-Source'),sourceIndex:parseInt(res.headers.get('X-Source-Index')||'0',10)});
    }else{
      const body=await res.json().catch(()=>({}));
      update(i,{status:'error',source:null,domain:body.domain,sourceIndex});
    }
  }catch(e){update(i,{status:'error',source:null,sourceIndex});}
}

document.getElementById('findBtn').onclick=async ()=>{
  const companies=parseCompanies(document.getElementById('companies').value);
  if(!companies.length)return;
  logos=companies.map(company=>({company,status:'pending'}));render();
  for(let i=0;i<companies.length;i+=BATCH_SIZE){
    await Promise.all(companies.slice(i,i+BATCH_SIZE).map((_,k)=>fetchLogo(i+k)));
  }
};

document.getElementById('zipBtn').onclick=async ()=>{
  const companies=logos.filter(l=>l.status==='success').map(l=>({company:l.company,sourceIndex:l.sourceIndex}));
  const res=await fetch('/api/archive',{method:'POST',headers:{'Content-Type':'application/json'},body:JSON.stringify({companies})});
  if(!res.ok){alert('Nothing to download');return;}
  const a=document.createElement('a');a.href=URL.createObjectURL(await res.blob());
  a.download=`logos-${Date.now()}.zip`;a.click();
};
</script>
</body>
</html>
"""


# --- Routes ---
@app.route("/")
def index():
    return render_template_string(TEMPLATE, total_sources=TOTAL_SOURCES, batch_size=BATCH_SIZE)


@app.route("/api/fetch-logo")
def fetch_logo():
    company = (request.args.get("company") or "").strip()
    if not company:
        return jsonify({"error": "Company parameter required"}), 400

    source_param = request.args.get("source")
    source_index = None
    if source_param is not None:
        try:
            source_index = int(source_param)
        except ValueError:
            return jsonify({"error": "source must be an integer", "company": company}), 400

    result = resolve_logo(
        company,
        source_index,
        allow_fallback=flag("fallback", True),
        prefer_icon=flag("icon", False),
    )

    if not result.found:
        body = {
            "error": "Logo not found" if source_index is None else "Logo not found from this source",
            "domain": result.domain,
            "company": company,
            "tried": list(result.tried_sources),
        }
        if source_index is not None:
            body["sourceIndex"] = source_index
        return jsonify(body), 404

    return Response(
        result.content,
        content_type=result.content_type,
        headers={
            "Cache-Control": CACHE_CONTROL,
            "X-Logo-Source": result.source_name,
            "X-Logo-Domain": result.domain,
            "X-Source-Index": str(result.source_index),
            "X-Total-Sources": str(TOTAL_SOURCES),
        },
    )


@app.route("/api/fetch-logos", methods=["POST"])
def fetch_logos():
    companies = read_companies()
    if companies is None:
        return jsonify({"error": "Expected JSON body {\"companies\": [\"...\"]}"}), 400

    logger.info(f"Bulk lookup for {len(companies)} companies")
    records = LogoBatch(companies).run()
    results = []
    for record in records:
        entry = {
            "company": record.company,
            "domain": record.domain,
            "success": record.status == SUCCESS,
        }
        if record.status == SUCCESS:
            entry.update(source=record.source, sourceIndex=record.source_index, type=record.content_type)
        results.append(entry)
    return jsonify({"results": results})


@app.route("/api/archive", methods=["POST"])
def archive():
    entries = read_archive_entries()
    if entries is None:
        return jsonify({"error": "Expected JSON body {\"companies\": [name or {company, sourceIndex}]}"}), 400

    companies = [company for company, _ in entries]
    batch = LogoBatch(companies, source_indices=[index for _, index in entries])
    batch.run()
    if not batch.successes():
        return jsonify({
            "error": "No logos found",
            "companies": companies,
            "domains": [company_to_domain(c) for c in companies],
        }), 404

    return send_file(
        io.BytesIO(build_zip(batch.records)),
        mimetype="application/zip",
        as_attachment=True,
        download_name=archive_name(),
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    app.run(debug=True, port=5000)
